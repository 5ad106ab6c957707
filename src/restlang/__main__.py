from restlang.cli import main

main()
