from aarya.cli import main

main()
