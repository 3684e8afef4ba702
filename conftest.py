from test_app.app import setup

setup()
