"""Entry point for Barista."""

from barista.app import BaristaApp


def main() -> None:
    app = BaristaApp()
    app.run()


if __name__ == "__main__":
    main()
