"""
Pydantic schema definitions for API payloads.

Lessons and orders each define their own models for request and
response bodies.  Field names follow the camelCase keys stored in
MongoDB (``phoneNumber``, ``lessonIDs``) through aliases, while the
Python attributes stay in snake_case.
"""
