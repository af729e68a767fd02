"""Core: configuración, dominio y el cliente REST genérico (sin httpx)."""
