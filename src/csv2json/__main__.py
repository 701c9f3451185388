from .cli import app

app(prog_name="csv2json")
