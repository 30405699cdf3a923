from zr.main import main


main()
