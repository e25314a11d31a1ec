"""GUI-agnostic core of the DMN builder: models, helpers, generators, services."""
