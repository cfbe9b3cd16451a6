"""
ai-cli: cliente de linha de comando para endpoints de chat completions.
"""

__version__ = "0.1.0"
