"""Entry point for modeldoc CLI when run as python -m modeldoc.cli."""

if __name__ == "__main__":
    from modeldoc.cli.main import main

    main()
