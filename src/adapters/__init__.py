"""Adaptadores de I/O: transport httpx, wrappers de recursos y exportación."""
