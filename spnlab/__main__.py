from spnlab.demo import main

main()
