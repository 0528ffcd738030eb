"""
Transcriptorator web service.

FastAPI application serving the session catalog, transcript search, and
the session player pages, plus the JSON API and the WebSocket channel
that keeps the transcript panel in step with video playback.
"""
