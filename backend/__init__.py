"""HTTP backend for Perspecta."""
