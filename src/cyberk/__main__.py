from cyberk.cli import main

main()
