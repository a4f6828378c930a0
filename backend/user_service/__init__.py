"""User directory service.

A small FastAPI backend storing `users(id, username, name, phone)` and
exposing create/read/list/update/delete over one of two transport
shapes: REST paths or request/response envelopes. Individual modules
contain the concrete implementations and documentation.
"""
