from goscaffold.cli import main

main()
