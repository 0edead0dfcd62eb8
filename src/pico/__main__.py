from pico.cli import main

main()
