"""Main entry point for the lcg_seeker package."""
from lcg_seeker.cli import ENVVAR_PREFIX, cli


def main():
    """Main entry point function."""
    cli(auto_envvar_prefix=ENVVAR_PREFIX)


if __name__ == "__main__":
    main()
