from ghprofile.app import main

main()
