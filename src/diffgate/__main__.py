"""Allow `python -m diffgate`."""

from diffgate.cli.main import cli

if __name__ == "__main__":
    cli()
