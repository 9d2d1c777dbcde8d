from isc.cli.main import app

app()
