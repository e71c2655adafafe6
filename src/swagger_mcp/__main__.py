from swagger_mcp.cli import main

main()
