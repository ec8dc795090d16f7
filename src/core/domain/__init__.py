"""Modelos y entidades del dominio.

Por qué:
- Aquí viven salas, jugadores, efectos y los modelos Pydantic de reportes.
- El dominio no conoce la consola, ficheros ni la CLI: solo conceptos del juego.
"""
