from fvwm_mcp.main import cli

cli()
