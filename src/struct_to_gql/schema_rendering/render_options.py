"""Rendering policy entities."""

from __future__ import annotations

from dataclasses import dataclass

from struct_to_gql.tag_parsing import TagFormatError

JSON_TAG_KEY = "json"
JSON_SKIP_VALUE = "-"


@dataclass(frozen=True)
class RequiredTag:
    """Tag key/value pair marking a field as non-null (`validate=required`)."""

    key: str
    value: str


@dataclass(frozen=True)
class RenderOptions:
    """Field naming, exclusion and required-marking policy."""

    use_json_tags: bool = False
    custom_tag: str | None = None
    ignore_value: str | None = None
    required_tag: RequiredTag | None = None

    @property
    def naming_tag(self) -> str | None:
        """Return the tag key whose value renames fields; the custom tag wins."""
        if self.custom_tag:
            return self.custom_tag
        if self.use_json_tags:
            return JSON_TAG_KEY
        return None

    @property
    def effective_ignore_value(self) -> str:
        """Return the resolved field name that drops a field from the output."""
        if self.ignore_value is not None:
            return self.ignore_value
        if self.use_json_tags:
            return JSON_SKIP_VALUE
        return ""


def parse_required_tag(text: str) -> RequiredTag:
    """Parse a `key=value` required-tag argument."""
    key, separator, value = text.partition("=")
    if not separator or not key or not value:
        raise TagFormatError("invalid format for required-tags, expected key=value")
    return RequiredTag(key=key, value=value)
