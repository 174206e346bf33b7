"""Allow ``python -m ghttp``."""

from ghttp.cli import main

main()
