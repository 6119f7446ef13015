"""Convert Go struct declarations into GraphQL schema types."""
