from solid_flutter.pipeline import main

main()
