"""
Service layer abstraction.

Each service encapsulates business logic for a domain and receives the
document store it works on through its constructor, so API handlers,
scripts and tests can all supply their own store.
"""
