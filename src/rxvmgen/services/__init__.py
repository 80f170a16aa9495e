"""Service layer — the rendering pipeline and its ServiceResult contract.

Services may import from domain, infrastructure, and config models.
They must never import from commands or output.
"""
