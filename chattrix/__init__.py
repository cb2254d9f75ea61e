"""ChatTrix notification backend.

Hosts the notification lifecycle (persistence, read-state tracking and
realtime delivery) for the ChatTrix social application.
"""
