from agent_builder.cli.main import app

app()
