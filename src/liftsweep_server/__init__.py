"""HTTP and WebSocket front end for liftsweep."""
