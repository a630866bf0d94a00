from tagbump.application import Application


def main() -> None:
    Application().run()


if __name__ == "__main__":
    main()
