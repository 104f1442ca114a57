from remo_exporter.main import main

main()
