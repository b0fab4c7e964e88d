"""HTTP/WebSocket hosting service for Binary Homeworlds games."""
