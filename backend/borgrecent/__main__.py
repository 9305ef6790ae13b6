from borgrecent.cli import main

main()
