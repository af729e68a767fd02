"""Servicios del Core: paginación, cliente de recursos y ensamblado."""
