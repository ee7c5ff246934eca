"""Core content pipeline: slugs, colors, content, pages, site, rendering."""
