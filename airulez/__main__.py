"""Allow ``python -m airulez``."""

from airulez.cli import main

main()
