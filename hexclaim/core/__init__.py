"""Core gameplay primitives (board arena, takeover engine, board events).

Kept free of FastAPI and asyncio concerns so it can be reused by the controller, API routes, and tests.
"""
