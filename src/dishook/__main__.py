from dishook.interfaces.cli import main

main()
