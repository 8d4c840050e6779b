from ngtail.pipeline import main

main()
