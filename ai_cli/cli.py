"""
Interface de linha de comando do ai-cli.
"""
import argparse
import logging
import sys
from typing import Callable, List, Optional

from . import __version__
from .config import AppConfig, DEFAULT_MODEL
from .core.engine import AssistantEngine
from .core.errors import AiCliError, MissingCredentialError
from .core.session_manager import ConversationSession, is_exit_command
from .core.task_framer import DEFAULT_TARGET_LANGUAGE
from .logging_config import configure_logging

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_REQUEST_ERROR = 1
EXIT_CONFIG_ERROR = 2

BANNER_TOP = "================ AI Response ================"
BANNER_BOTTOM = "============================================"
NO_REPLY_NOTICE = "No response received from AI."
CHAT_BANNER = "Starting interactive chat (type 'exit' to quit)"

STDIN_HINTS = {
    "ask": "Enter your prompt (Ctrl+D to finish):",
    "summarize": "Paste text to summarize (Ctrl+D to finish):",
    "translate": "Paste text to translate (Ctrl+D to finish):",
}


class InputError(Exception):
    """
    Entrada do usuário ausente ou vazia.
    """


def _color(text: str, code: str, stream=None) -> str:
    stream = stream or sys.stdout
    if stream.isatty():
        return f"\033[{code}m{text}\033[0m"
    return text


def _add_model_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-m",
        "--model",
        dest="model",
        help=f"Model name (default from AI_MODEL, else {DEFAULT_MODEL}).",
    )
    parser.add_argument(
        "-n",
        "--max-tokens",
        dest="max_tokens",
        type=int,
        help="Max tokens (response length).",
    )
    parser.add_argument(
        "-T",
        "--temperature",
        dest="temperature",
        type=float,
        help="Temperature (controls randomness).",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ai-cli",
        description="A small AI-powered CLI tool.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "-v",
        "--verbose",
        dest="verbose",
        action="store_true",
        help="Verbose logging.",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.required = True

    ask = subparsers.add_parser("ask", help="Ask a single question and get an AI-generated reply.")
    ask.add_argument("prompt", nargs="?", help="The prompt or question to send (default: stdin).")
    _add_model_options(ask)

    summarize = subparsers.add_parser("summarize", help="Summarize text input.")
    summarize.add_argument("text", nargs="?", help="Text to summarize (default: stdin).")
    _add_model_options(summarize)

    translate = subparsers.add_parser("translate", help="Translate text into another language.")
    translate.add_argument("text", nargs="?", help="Text to translate (default: stdin).")
    translate.add_argument(
        "-t",
        "--to",
        dest="to",
        default=DEFAULT_TARGET_LANGUAGE,
        help='Target language (e.g., "fr", "es", "id").',
    )
    _add_model_options(translate)

    chat = subparsers.add_parser("chat", help="Start an interactive chat session.")
    _add_model_options(chat)
    return parser


def get_input_or_stdin(text: Optional[str], hint: str) -> str:
    """
    Usa o texto posicional se houver; senão lê o stdin até o fim.
    """
    if text is None:
        if sys.stdin.isatty():
            print(_color(hint, "34", sys.stderr), file=sys.stderr)
        text = sys.stdin.read()
    text = text.rstrip()
    if not text.strip():
        raise InputError("No input text provided.")
    return text


def print_reply(reply: Optional[str]) -> None:
    if reply is None:
        print(_color(NO_REPLY_NOTICE, "33"))
        return
    print(_color(BANNER_TOP, "1;32"))
    print(reply)
    print(_color(BANNER_BOTTOM, "1;32"))


def print_error(exc: Exception) -> None:
    print(_color(f"Error: {exc}", "31", sys.stderr), file=sys.stderr)


def run_chat(session: ConversationSession) -> None:
    """
    Loop interativo: lê uma linha, envia, imprime, repete até "exit" ou EOF.
    Falhas de um turno são reportadas e o loop continua.
    """
    print(_color(CHAT_BANNER, "1;36"))
    while True:
        print(_color("You: ", "1;34"), end="", flush=True)
        line = sys.stdin.readline()
        if not line:
            # EOF (Ctrl+D)
            print()
            break
        user_text = line.strip()
        if is_exit_command(user_text):
            break
        # Linha vazia não é enviada: Message nunca tem conteúdo vazio,
        # e isso prevalece sobre "qualquer outra entrada envia"
        if not user_text:
            continue
        try:
            reply = session.advance(user_text)
        except AiCliError as e:
            print_error(e)
            continue
        if reply is None:
            print(_color(NO_REPLY_NOTICE, "33"))
        else:
            print(_color(f"AI: {reply}", "32"))
    logger.info(f"Sessão de chat encerrada: turns={session.turns}")


def run_command(args: argparse.Namespace, engine: AssistantEngine) -> int:
    overrides = {"max_tokens": args.max_tokens, "temperature": args.temperature}
    if args.command == "chat":
        session = engine.start_chat(model=args.model, **overrides)
        run_chat(session)
        return EXIT_OK

    if args.command == "ask":
        prompt = get_input_or_stdin(args.prompt, STDIN_HINTS["ask"])
        reply = engine.ask(prompt, model=args.model, **overrides)
    elif args.command == "summarize":
        text = get_input_or_stdin(args.text, STDIN_HINTS["summarize"])
        reply = engine.summarize(text, model=args.model, **overrides)
    elif args.command == "translate":
        text = get_input_or_stdin(args.text, STDIN_HINTS["translate"])
        reply = engine.translate(text, to=args.to, model=args.model, **overrides)
    else:
        raise ValueError(f"Unknown command: {args.command}")
    print_reply(reply)
    return EXIT_OK


def main(
    argv: Optional[List[str]] = None,
    engine_factory: Callable[[AppConfig], AssistantEngine] = AssistantEngine,
) -> int:
    """
    Ponto de entrada do CLI. Retorna o código de saída do processo.
    """
    args = build_parser().parse_args(argv)

    # Credencial resolvida uma vez, antes de qualquer comando (inclusive chat)
    try:
        config = AppConfig.load_from_env()
    except (MissingCredentialError, ValueError) as e:
        print_error(e)
        return EXIT_CONFIG_ERROR

    configure_logging("DEBUG" if args.verbose else config.log_level, config.log_file)
    logger.debug(f"Comando recebido: command={args.command}")

    try:
        engine = engine_factory(config)
        return run_command(args, engine)
    except (InputError, ValueError) as e:
        print_error(e)
        return EXIT_CONFIG_ERROR
    except AiCliError as e:
        logger.debug(f"Comando falhou: command={args.command}, error={type(e).__name__}")
        print_error(e)
        return EXIT_REQUEST_ERROR
    except KeyboardInterrupt:
        print()
        return 130


if __name__ == "__main__":
    sys.exit(main())
