"""Interactive terminal prompts: a filterable select list, validation and transforms."""

__version__ = "0.1.0"