from battery_watcher.main import main

main()
