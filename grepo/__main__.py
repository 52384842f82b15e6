from grepo.cli.app import main

main()
