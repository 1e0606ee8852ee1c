"""Stage pages and editor widgets."""
