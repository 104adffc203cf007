from review_scraper.cli import main

main()
