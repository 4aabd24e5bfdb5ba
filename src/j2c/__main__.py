from j2c.cli import run

run()
