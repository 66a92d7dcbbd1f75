from bookingdesk.main import main

main()
