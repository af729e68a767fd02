"""Contratos del Core.

Por qué:
- El core habla con un `HttpTransport` abstracto, no con httpx.
- Los tests sustituyen el transport por un fake que graba las peticiones.
"""
