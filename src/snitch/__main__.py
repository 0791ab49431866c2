from snitch.cli import run

run()
