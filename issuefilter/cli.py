# issuefilter/cli.py
import logging
import sys
from typing import Annotated

import cyclopts

from issuefilter.query import ParseError, parse, qualifier_names
from issuefilter.query.keywords import matching_keywords

app = cyclopts.App(
    name="issuefilter",
    help="Check and complete issue filter expressions.",
)


@app.command(name="check")
def check(
    query: Annotated[str, cyclopts.Parameter(help="Filter expression, e.g. 'label:bug is:open'")],
    names: Annotated[
        bool,
        cyclopts.Parameter(name="--names", help="Also list the qualifiers used"),
    ] = False,
    verbose: Annotated[
        bool,
        cyclopts.Parameter(name=["--verbose", "-v"], help="Log parser activity"),
    ] = False,
) -> None:
    """Validate a filter and print its canonical form."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG)

    try:
        expr = parse(query)
    except ParseError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        print(e.highlight(), file=sys.stderr)
        sys.exit(1)

    print(expr)
    if names:
        for name in qualifier_names(expr):
            print(f"  {name}")


@app.command(name="keywords")
def keywords(
    fragment: Annotated[str, cyclopts.Parameter(help="Part of the word being completed")] = "",
    limit: Annotated[
        int | None,
        cyclopts.Parameter(name=["--max", "-n"], help="Maximum number of suggestions"),
    ] = None,
) -> None:
    """List completion keywords containing a fragment."""
    for word in matching_keywords(fragment, limit):
        print(word)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
