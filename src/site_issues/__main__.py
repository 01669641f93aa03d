from site_issues.cli.app import main

main()
