from fxc.main import app

app()
