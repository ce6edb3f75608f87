"""rsTable: a searchable, sortable restaurant table backed by a flat JSON file."""

__version__ = "1.0.0"
