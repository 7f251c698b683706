"""Option catalog: immutable option data, JSON loading, and authoring audits."""
