from mecha_mcp.cli import main

main()
