from webinar.main import main

main()
