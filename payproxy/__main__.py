from payproxy.main import run

run()
