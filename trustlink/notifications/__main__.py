from trustlink.notifications.worker import main

main()
