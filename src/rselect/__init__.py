"""rselect: interactive line picker built on rich_select."""

__version__ = "0.1.0"
