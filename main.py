"""
Runner na raiz do repositório para o ai-cli.

Exemplos:
    python main.py ask "What is the capital of France?"
    echo "Bonjour" | python main.py translate --to en
    python main.py chat --model gpt-4o-mini
"""
import sys

from ai_cli.cli import main

if __name__ == "__main__":
    sys.exit(main())
