from scheme_handshake.cli import app

app()
