"""Web interface for csv2json."""
