"""Points, vectors, colors, matrices and rays."""
