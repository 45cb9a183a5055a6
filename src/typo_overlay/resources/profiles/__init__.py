"""Built-in YAML profiles, loaded with core.config.load_profile()."""
