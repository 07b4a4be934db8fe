"""Generation pipeline: discovery, path mapping, link resolution, rendering."""
