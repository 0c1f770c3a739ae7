"""Entity hook configuration files: loading and schema validation."""
