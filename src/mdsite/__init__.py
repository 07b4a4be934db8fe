"""mdsite - static HTML pages from a tree of markdown files."""
