from vgnguard.cli import run

run()
