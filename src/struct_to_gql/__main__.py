"""Module entry point for `python -m struct_to_gql`."""

from .cli import main

if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
