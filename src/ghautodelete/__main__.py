from ghautodelete import main

main()
