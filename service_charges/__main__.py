from service_charges.cli import main

main()
