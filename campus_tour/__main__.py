from campus_tour.cli import main

main()
