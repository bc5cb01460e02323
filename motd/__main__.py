from motd.main import run

run()
