class ExerciseForce:
    STATIC = 'static'
    PULL = 'pull'
    PUSH = 'push'

    _ALL = (STATIC, PULL, PUSH)


class ExerciseLevel:
    BEGINNER = 'beginner'
    INTERMEDIATE = 'intermediate'
    EXPERT = 'expert'

    _ALL = (BEGINNER, INTERMEDIATE, EXPERT)


class ExerciseMechanic:
    ISOLATION = 'isolation'
    COMPOUND = 'compound'

    _ALL = (ISOLATION, COMPOUND)


class ExerciseEquipment:
    _ALL = (
        'medicine ball',
        'dumbbell',
        'body only',
        'bands',
        'kettlebells',
        'foam roll',
        'cable',
        'machine',
        'barbell',
        'exercise ball',
        'e-z curl bar',
        'other',
    )


class ExerciseMuscle:
    _ALL = (
        'abdominals',
        'abductors',
        'adductors',
        'biceps',
        'calves',
        'chest',
        'forearms',
        'glutes',
        'hamstrings',
        'lats',
        'lower back',
        'middle back',
        'neck',
        'quadriceps',
        'shoulders',
        'traps',
        'triceps',
    )


class ExerciseCategory:
    _ALL = (
        'powerlifting',
        'strength',
        'stretching',
        'cardio',
        'olympic weightlifting',
        'strongman',
        'plyometrics',
    )
