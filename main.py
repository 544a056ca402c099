"""
main.py - oci-tf-bootstrap 실행 진입점

    $ python main.py --profile prod -o ./tf
    $ oci-tf-bootstrap --json          # pip install 후 console script
"""

from cli.app import cli


def main() -> None:
    """console script 진입점 (cli.app:cli 위임)"""
    cli(prog_name="oci-tf-bootstrap")


if __name__ == "__main__":
    main()
