"""Small helpers shared by the domain and query layers."""
