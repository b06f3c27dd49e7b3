from __future__ import annotations
import argparse
import logging
from . import __version__
from .errors import PromptError
from .git import SHORT_HASH_LEN, RepoLocator
from .primitives import Primitives
from .render import Renderer, default_prompt, load_template
from .styles import ANSIStyler, BashStyler, ZshStyler

log = logging.getLogger("promptscript")


def positive_int(s: str) -> int:
    n = int(s)
    if n <= 0:
        raise argparse.ArgumentTypeError(f"{s!r} is not a positive integer")
    return n


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        description="Render a bash/zsh prompt from a Python prompt template"
    )
    parser.add_argument(
        "--ansi",
        action="store_const",
        dest="stylecls",
        const=ANSIStyler,
        help="Format prompt for direct display",
    )
    parser.add_argument(
        "--bash",
        action="store_const",
        dest="stylecls",
        const=BashStyler,
        help="Format prompt for Bash's PS1 (default)",
    )
    parser.add_argument(
        "-x",
        "--exit-code",
        type=int,
        default=0,
        metavar="INT",
        help="Exit status of the previous command, for use by the template",
    )
    parser.add_argument(
        "--hash-length",
        type=positive_int,
        default=SHORT_HASH_LEN,
        metavar="INT",
        help=(
            "Number of characters of the commit hash to show when HEAD is"
            f" detached  [default: {SHORT_HASH_LEN}]"
        ),
    )
    parser.add_argument(
        "-l",
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default="WARNING",
        help="Set the level of messages logged to stderr  [default: WARNING]",
    )
    parser.add_argument(
        "--no-git",
        action="store_true",
        help="Disable Git integration",
    )
    parser.add_argument(
        "--zsh",
        action="store_const",
        dest="stylecls",
        const=ZshStyler,
        help="Format prompt for zsh's PS1",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "template",
        nargs="?",
        help="Python file that assigns the prompt to PROMPT",
    )
    args = parser.parse_args(argv)
    logging.basicConfig(
        format="%(asctime)s [%(levelname)-8s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        level=getattr(logging, args.log_level),
    )
    styler = (args.stylecls or BashStyler)()
    prims = Primitives(
        styler=styler,
        locator=RepoLocator(enabled=not args.no_git),
        short_hash_len=args.hash_length,
        exit_code=args.exit_code,
    )
    try:
        if args.template is not None:
            prompt = load_template(args.template, prims.namespace())
        else:
            prompt = default_prompt(prims)
        s = Renderer(prims).render(prompt)
    except PromptError as e:
        log.debug("Rendering failed", exc_info=True)
        s = f"Error: {e}"
    print(s)


if __name__ == "__main__":
    main()
