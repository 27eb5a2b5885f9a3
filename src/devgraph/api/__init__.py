"""HTTP application for the devgraph API."""
