from unixtime.cli import main

main()
