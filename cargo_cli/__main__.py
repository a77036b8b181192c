from cargo_cli.cli import main

main()
