from gopub.cli.app import main

main()
