# pure_boot/__main__.py
from pure_boot.cli import app


def main():
    """
    Main application
    """
    app()


if __name__ == "__main__":
    main()
