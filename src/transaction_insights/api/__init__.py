"""HTTP API: application factory, routes and the response envelope."""
