from lade.cli import main

main()
