from tutodao.demo import main

main()
