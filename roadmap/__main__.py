from roadmap.server import main

main()
