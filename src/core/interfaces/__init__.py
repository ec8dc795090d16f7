"""Interfaces/abstracciones del Core.

Por qué:
- Define contratos (Protocol) que implementan la consola y los tests.
- El motor de juego depende de la abstracción, no de Rich ni de stdin.
"""
