from tapcalc.main import main

main()
