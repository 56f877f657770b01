from cihelper.cli.app import main

main()
