from carthage_release.cli.app import main

main()
