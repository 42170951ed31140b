"""
Interactive PLANG checker.

Reads a program unit at a time (continuing lines until braces balance), checks
it and prints the verdict. Each unit gets a fresh scanner and parser.

Commands:
    exit, quit   Leave the REPL.
    tokens       Toggle printing the token stream before each verdict.
"""

from plang.plang_check import check_source
from plang.plang_cli import format_token
from plang.plang_scanner import tokenize


def read_unit() -> str | None:
    """Reads lines until the braces of the unit balance.

    Returns:
        str | None: The collected source, or None when the user asked to quit.
    """
    src_lines: list[str] = []
    brace_count = 0
    while True:
        prompt = ">>> " if not src_lines else "... "
        line = input(prompt)
        if line.strip() in ("exit", "quit") and not src_lines:
            return None
        src_lines.append(line)
        brace_count += line.count("{") - line.count("}")
        if brace_count <= 0 and (
            line.strip().endswith("}") or not any("{" in line_ for line_ in src_lines)
        ):
            break
    return "\n".join(src_lines)


def start_repl(show_tokens: bool = False) -> None:
    print("PLANG REPL. Type 'exit' or 'quit' to leave.")

    while True:
        try:
            src = read_unit()
            if src is None:
                print("Exiting PLANG REPL.")
                return
            if not src.strip():
                continue
            if src.strip() == "tokens":
                show_tokens = not show_tokens
                print(f"[mode] >>> Token output {'ON' if show_tokens else 'OFF'}")
                continue

            if show_tokens:
                for tok in tokenize(src):
                    print(format_token(tok))

            result = check_source(src)
            if result.ok:
                print(f"[ok] >>> {result.message}")
            else:
                print(f"[error] >>> {result.message}")

        except (KeyboardInterrupt, EOFError):
            print("\nExiting PLANG REPL.")
            break


def main() -> None:
    start_repl()


if __name__ == "__main__":
    main()
