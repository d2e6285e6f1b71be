from tailsieve.cli import run_cli

run_cli()
