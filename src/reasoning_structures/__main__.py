"""Entry point for python -m reasoning_structures."""


def main() -> None:
    """Run the reasoning-structures CLI application."""
    from reasoning_structures.cli.main import main as cli_main

    cli_main()


if __name__ == "__main__":
    main()
