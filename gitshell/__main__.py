from gitshell.cli.app import main

main()
