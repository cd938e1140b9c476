"""quality-agent command line."""
