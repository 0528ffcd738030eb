"""
Router package for the Transcriptorator web service.

Contains the HTML page routes, the JSON API routers for sessions and
search, the player follow WebSocket, and the health endpoint.
"""
