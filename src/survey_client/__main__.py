from survey_client.cli import main

main()
