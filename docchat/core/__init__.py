"""
Core pipeline: chunking, batch embedding, retrieval, context assembly,
stream relay and ingestion coordination. Talks to the outside world only
through the ABCs in `docchat.core.interfaces`.
"""
