"""Modelos del dominio de la skill.

Por qué:
- Aquí viven los tipos de resultado/errores (Pydantic v2) que devuelven los comandos.
- El dominio no conoce httpx ni la CLI: solo proyecta payloads ya decodificados.
"""
